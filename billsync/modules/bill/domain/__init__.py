from .models import GenerateResult

__all__ = ["GenerateResult"]
