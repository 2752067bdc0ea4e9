"""
This file contains various project-wide utilities.

"""

__all__ = [
    "ifnone",
]


def ifnone(o: any, default: any) -> any:
    "Returns `o` if it is not `None`; returns `default` otherwise."
    return o if o is not None else default
