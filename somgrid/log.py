import logging

from .core import ifnone


__all__ = [
    "safeget",
    "getname",
    "get_logger",
    "has_logger",
]


def safeget(o: any, attr: str) -> any:
    "Returns attribute `attr` of `o`, or `None` if it cannot be read."
    try:
        return getattr(o, attr)
    except AttributeError:
        return None


def getname(o: any) -> str:
    """
    Returns the class name of `o`, or the name of `o` itself if it is a class.

    Parameters
    ----------
    o : any
        An object or a class.
    """
    if isinstance(o, type):
        return o.__name__
    o = ifnone(safeget(o, "__class__"), o)
    return o.__name__


def get_logger(o: any) -> logging.Logger:
    """
    Returns a logger named after `o`.

    Parameters
    ----------
    o : any
        A logger name, an object or a class.
    """
    name = o if isinstance(o, str) else getname(o)
    return logging.getLogger(f"somgrid.{name}")


def has_logger(cls: type) -> type:
    "Class decorator that attaches a class-level `logger` attribute."
    cls.logger = get_logger(cls)
    return cls
