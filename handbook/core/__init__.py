from .response import ApiResponse, success_response


__all__ = ["ApiResponse", "success_response"]
