from .logger import SetupLogger

__all__ = ['SetupLogger']
