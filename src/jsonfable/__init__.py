from jsonfable.common.exceptions import JsonfableError
from jsonfable.common.exceptions import UnknownMember
from jsonfable.common.exceptions import UnknownType
from jsonfable.core import Reference
from jsonfable.core import Referrable
from jsonfable.core import ReferrableMember
from jsonfable.core import Registry
from jsonfable.core import TagDict
from jsonfable.core import TypeDescriptor
from jsonfable.core import decode
from jsonfable.core import dump_plain
from jsonfable.core import encode
from jsonfable.core import load_plain
from jsonfable.core import mark
from jsonfable.core import refer_bound
from jsonfable.core import referrable

__version__ = "0.1.0"

__all__ = (
    "JsonfableError",
    "Reference",
    "Referrable",
    "ReferrableMember",
    "Registry",
    "TagDict",
    "TypeDescriptor",
    "UnknownMember",
    "UnknownType",
    "decode",
    "dump_plain",
    "encode",
    "load_plain",
    "mark",
    "refer_bound",
    "referrable",
)
