from .routes import api_bp, main_bp

__all__ = ["api_bp", "main_bp"]
