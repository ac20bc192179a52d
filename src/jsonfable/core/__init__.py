from jsonfable.core.decoder import decode
from jsonfable.core.decoder import load_plain
from jsonfable.core.encoder import dump_plain
from jsonfable.core.encoder import encode
from jsonfable.core.reference import Reference
from jsonfable.core.reference import Referrable
from jsonfable.core.reference import ReferrableMember
from jsonfable.core.reference import mark
from jsonfable.core.reference import refer_bound
from jsonfable.core.reference import referrable
from jsonfable.core.registry import Registry
from jsonfable.core.registry import TypeDescriptor
from jsonfable.core.tag import TagDict

__all__ = (
    "Reference",
    "Referrable",
    "ReferrableMember",
    "Registry",
    "TagDict",
    "TypeDescriptor",
    "decode",
    "dump_plain",
    "encode",
    "load_plain",
    "mark",
    "refer_bound",
    "referrable",
)
