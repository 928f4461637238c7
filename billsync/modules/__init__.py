"""Feature modules: artifacts, bill and treesync."""
