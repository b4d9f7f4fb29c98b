r"""
optscan option descriptors, registry and parse records.

Overview
- Requirement: whether an option takes a value (none / required / optional).
- Descriptor[_Id]: binds a caller-defined opaque identity to an optional
  short name ("x"), an optional long name ("name") and a Requirement.
- Registry[_Id]: immutable, ordered sequence of descriptors with linear
  first-match lookups by short or long name.
- Parsed[_Id]: the record handed to the caller's callback for every option
  occurrence found in the argument vector.

Names are stored without their prefixes: a descriptor for "-v/--verbose" is
Descriptor(ID, "v", "verbose").

Lookups
- Registry.short(char) / Registry.long(name) scan descriptors in order and
  return the index of the first match. Duplicated names are not rejected:
  the first one registered wins.

Quick example:
    >>> from optscan import Descriptor, Registry, Requirement
    >>> registry = Registry((
    ...     Descriptor("verbose", "v", "verbose"),
    ...     Descriptor("output", "o", "output", Requirement.REQUIRED),
    ... ))
    >>> registry.long("output")
    1
"""
import collections
import enum
import functools
import operator
import re
from collections.abc import Iterable, Sequence

from .utils import *


class Requirement(enum.Enum):
    """
    argument requirement of an option.

    - NONE: the option never takes a value.
    - REQUIRED: the option takes a value, attached or from the next token.
    - OPTIONAL: the option takes a value only when attached
      ("-xvalue" or "--name=value"); it never reaches into the next token.
    """
    NONE = "none"
    REQUIRED = "required"
    OPTIONAL = "optional"

    def __repr__(self):
        return f"{type(self).__name__}.{self.name}"


class DescriptorType(type):
    """
    Metaclass that wires read-only properties and stable representations.

    - Every name listed in __introspectable__ becomes a read-only property
      backed by "_{name}" (see mirror()).
    - __typename__ is derived from the class name and used in messages.
    - __repr__/__rich_repr__ list the introspectable fields.
    """

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_names(cls, metadata, /):
    """
    Internal: validate the short and long names of a descriptor.

    - short: None or a single character. "-" is accepted; it can only match
      inside a cluster such as "-a-".
    - long: None or a non-empty string without "=" (the inline value separator).

    Only the shape of each name is checked. Whether a descriptor has any
    name at all, and whether names collide across a registry, is left to
    the caller.
    """
    if not isinstance(short := metadata["short"], str | None):
        raise TypeError(f"{cls.__typename__} 'short' must be a string")
    elif isinstance(short, str) and len(short) != 1:
        raise ValueError(f"{cls.__typename__} 'short' must be a single character")

    if not isinstance(long := metadata["long"], str | None):
        raise TypeError(f"{cls.__typename__} 'long' must be a string")
    elif isinstance(long, str) and not long:
        raise ValueError(f"{cls.__typename__} 'long' cannot be empty")
    elif isinstance(long, str) and "=" in long:
        raise ValueError(f"{cls.__typename__} 'long' cannot contain '='")


def _sanitize_requirement(cls, metadata, /):
    """
    Internal: normalize the requirement into a Requirement member.

    Accepts a member or its string value ("none", "required", "optional").
    """
    if isinstance(requirement := metadata["requirement"], Requirement):
        return
    if not isinstance(requirement, str):
        raise TypeError(f"{cls.__typename__} 'requirement' must be a requirement or a string")
    try:
        metadata["requirement"] = Requirement(requirement)
    except ValueError:
        raise ValueError(
            f"{cls.__typename__} 'requirement' must be one of %s" % ", ".join(map(repr, (
                member.value for member in Requirement
            )))
        ) from None


class Descriptor[_Id](metaclass=DescriptorType):
    """
    Static description of one option.

    Attributes (read-only)
    - identity: the caller's opaque value, handed back through Parsed so the
      callback can tell which option fired. Never inspected by the parser.
    - short: single-character name used as "-x", or None.
    - long: name used as "--name", or None.
    - requirement: Requirement member.
    """

    __introspectable__ = (
        "identity",
        "short",
        "long",
        "requirement",
    )

    def __new__(cls, identity, /, short=None, long=None, requirement=Requirement.NONE):
        metadata = {
            "identity": identity,
            "short": short,
            "long": long,
            "requirement": requirement,
        }
        _sanitize_names(cls, metadata)
        _sanitize_requirement(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self


class Registry[_Id](Sequence):
    """
    Ordered, immutable collection of descriptors.

    The registry is read-only once built and can be shared by any number of
    parses. Lookups are linear scans in registration order.
    """

    def __init__(self, descriptors=(), /):
        if not isinstance(descriptors, Iterable):
            raise TypeError("registry argument must be an iterable of descriptors")
        descriptors = tuple(descriptors)
        for descriptor in descriptors:
            if not isinstance(descriptor, Descriptor):
                raise TypeError("registry items must be descriptors, not %r" % type(descriptor).__name__)
        self._descriptors = descriptors

    def __getitem__(self, index, /):
        if isinstance(index, slice):
            return type(self)(self._descriptors[index])
        return self._descriptors[index]

    def __len__(self):
        return len(self._descriptors)

    def __repr__(self):
        return f"registry({", ".join(map(repr, self._descriptors))})"

    def __rich_repr__(self):
        yield from self._descriptors

    def short(self, name, /):
        """
        return the index of the first descriptor whose short name is `name`, or None.
        """
        for index, descriptor in enumerate(self._descriptors):
            if descriptor.short is not None and descriptor.short == name:
                return index
        return None

    def long(self, name, /):
        """
        return the index of the first descriptor whose long name is `name`, or None.
        """
        for index, descriptor in enumerate(self._descriptors):
            if descriptor.long is not None and descriptor.long == name:
                return index
        return None


class Parsed(collections.namedtuple("Parsed", ("name", "value", "descriptor"))):
    """
    One option occurrence, as handed to the callback.

    Fields
    - name: the option name as written, without prefix and without "=value"
      ("v" for "-v", "output" for "--output=x").
    - value: the attached or separate value, or None when absent. An explicit
      "--name=" yields the empty string.
    - descriptor: the matched Descriptor, or None for an unrecognized option.

    Attribute
    - prefix: "-" or "--" as typed on the command line, or None for records
      built by hand. It is not a tuple field and takes no part in equality.
    """
    prefix = None

    def __new__(cls, name, value, descriptor, *, prefix=None):
        self = super().__new__(cls, name, value, descriptor)
        if prefix is not None:
            self.prefix = prefix
        return self

    @property
    def identity(self):
        """
        the matched descriptor's identity, or None for an unrecognized option.
        """
        return None if self.descriptor is None else self.descriptor.identity


__all__ = (
    "Requirement",
    "Descriptor",
    "Registry",
    "Parsed",
)

# Internal metaclass, not part of the public API.
del DescriptorType
