# logger/__init__.py
from .custom_logger import CustomLogger

__all__ = ["CustomLogger"]
