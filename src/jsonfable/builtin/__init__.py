from jsonfable.builtin.dataclasses import FableDataclass

__all__ = ("FableDataclass",)
