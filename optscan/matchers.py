"""
optscan matchers: recognize one option token at the front of the queue.

Each matcher inspects the front token of an ArgumentQueue and either
declines (returns None and leaves the queue untouched) or accepts it: the
token is popped unconditionally and the matcher may pop one more token as
a separate value.

Matchers report occurrences as Match records holding the index of the
matched descriptor inside the registry rather than the descriptor itself;
the scanner resolves indices when building the public Parsed records.

- match_long: "--name", "--name=value", "--name value" (required only).
- match_short: "-x", "-xvalue", "-x value" (required only), clusters "-xyz".

Neither matcher accepts the end-of-options marker "--" nor the lone "-".

Short clusters are walked one code point at a time, the unit of a Python
str and of a descriptor's one-character short name. A character written
with combining marks ("e" followed by U+0301) is therefore several
occurrences; normalize arguments to NFC first if that matters.
"""
import collections

from .descriptors import Requirement

LONG_PREFIX = "--"
SHORT_PREFIX = "-"
SEPARATOR = "="

Match = collections.namedtuple("Match", ("name", "value", "index"))


def _separate_value(queue, descriptor, /):
    # only a required value may be taken from the following token
    if descriptor.requirement is Requirement.REQUIRED:
        return queue.pop()
    return None


def match_long(queue, registry, /):
    """
    match one long option token.

    applies when the front token starts with "--" and is strictly longer
    than it.

    - "--name=value": split at the first "="; the value is kept even when
      the name is unknown, so callers can report what was passed.
    - "--name": a known name with a required value takes the next token,
      whatever it looks like. Optional and valueless names take nothing,
      and an unknown name never takes a separate value.

    returns a Match or None.
    """
    argument = queue.peek()
    assert argument is not None, "match_long() called on an empty queue"

    if len(argument) <= len(LONG_PREFIX) or not argument.startswith(LONG_PREFIX):
        return None
    queue.pop()

    name, separator, value = argument[len(LONG_PREFIX):].partition(SEPARATOR)
    index = registry.long(name)
    if separator:
        return Match(name, value, index)

    if index is None:
        return Match(name, None, None)
    return Match(name, _separate_value(queue, registry[index]), index)


def match_short(queue, registry, /):
    """
    match one short option token, expanding clusters.

    applies when the front token is at least two characters long, starts
    with "-" and its second character is not "-".

    code points are scanned left to right, one Match each:
    - unknown or valueless: no value, scanning continues.
    - required or optional: the rest of the token, if any, is the value and
      ends the scan. With nothing left, a required option takes the next
      token; an optional one stays without value.

    returns a list of Match or None.
    """
    argument = queue.peek()
    assert argument is not None, "match_short() called on an empty queue"

    if len(argument) < 2 or argument[0] != SHORT_PREFIX or argument[1] == SHORT_PREFIX:
        return None
    queue.pop()

    matches = []
    position = len(SHORT_PREFIX)
    while position < len(argument):
        name = argument[position]
        position += 1

        index = registry.short(name)
        if index is None:
            matches.append(Match(name, None, None))
            continue

        descriptor = registry[index]
        if descriptor.requirement is Requirement.NONE:
            matches.append(Match(name, None, index))
            continue

        if position < len(argument):
            # the remainder is a value, not more options
            matches.append(Match(name, argument[position:], index))
            break
        matches.append(Match(name, _separate_value(queue, descriptor), index))
    return matches


__all__ = (
    "LONG_PREFIX",
    "SHORT_PREFIX",
    "SEPARATOR",
    "Match",
    "match_long",
    "match_short",
)
