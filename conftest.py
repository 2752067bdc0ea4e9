"""
Lets pytest run `unittest` cases decorated with `nose2.tools.params`,
expanding each parameter set into its own test method as nose2 does.
"""
import unittest


def _bind(fn, args):
    def test(self):
        return fn(self, *args)
    test.__name__ = fn.__name__
    return test


def _expand_params(cls: type) -> None:
    for name, fn in list(vars(cls).items()):
        params = getattr(fn, "paramList", None)
        if not name.startswith("test") or params is None:
            continue
        delattr(cls, name)
        for idx, args in enumerate(params, start=1):
            args = args if isinstance(args, tuple) else (args,)
            setattr(cls, f"{name}:{idx}", _bind(fn, args))


def pytest_pycollect_makeitem(collector, name, obj):
    if isinstance(obj, type) and issubclass(obj, unittest.TestCase):
        _expand_params(obj)
