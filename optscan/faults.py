"""
optscan faults: classify parsed occurrences and render them.

The scanner never raises on user input. It hands every occurrence to the
caller as a Parsed record, and three anomalies can be read off that record:

- unrecognized option: no descriptor matched the name;
- unexpected value: a valueless option got one ("--flag=x");
- missing value: a required option found nothing to take.

This module turns those anomalies into exceptions a caller can raise,
collect or print.

Scope
- FaultCode: stable numeric identifiers for the three anomalies.
- OptionFault: base exception carrying a message and options, rendering
  itself through rich.
- diagnose(): Parsed -> OptionFault | None.
- trigger(): surface a fault (raise outside shell mode; print otherwise).

Host configuration (looked up on __main__)
- __prog__: program label shown in fault headers.
- __styles__: rich styles overriding the defaults below.
- __codes__: mapping FaultCode -> label overriding the numeric code.
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .descriptors import Requirement
from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    - UNRECOGNIZED_OPTION: the name matches no descriptor.
    - UNEXPECTED_VALUE: a value was given to an option that takes none.
    - MISSING_VALUE: a required value was not found.
    """
    UNRECOGNIZED_OPTION = 11112
    UNEXPECTED_VALUE    = 11113
    MISSING_VALUE       = 11117

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class OptionFault(Exception):
    """
    base class of every fault reported about a parsed option.

    options
    - parsed: the Parsed record the fault is about.
    - code, title, hint: header and guidance shown when rendered.
    - prog: program label (falls back to __main__.__prog__, then "optscan").
    - shell: print instead of raising when triggered.
    - deferred: in shell mode, keep going instead of exiting.
    - fancy: render inside a panel.
    - colorful: apply styles.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", False)
        fancy = self.options.get("fancy", False)

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if isinstance(fragment, Text):
                return fragment if colorful else Text(fragment.plain)
            return Text(str(fragment), style)

        prog = self.options.get("prog", getattr(main, "__prog__", "optscan"))
        header = Text.assemble(
            "[ ",
            text(prog, styler("prog-name")),
            " — ",
            text(self.options["code"].normalize(), styler("code")),
            " | ",
            text(self.options["title"].title(), styler("error-title")),
            " ]",
        )
        message = text(self.message, styler("error-message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.options.get("hint"), styler("hint")))

        if fancy:
            return Panel(Group(message, hint), title=header, title_align="left")
        return Group(header, message, hint)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        if self.options.get("deferred", False):
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnrecognizedOptionError(OptionFault): ...
class UnexpectedValueError(OptionFault): ...
class MissingValueError(OptionFault): ...


def _spelling(parsed):
    # the name as typed when the scanner recorded the prefix, else a best guess
    if (prefix := getattr(parsed, "prefix", None)) is not None:
        return prefix + parsed.name
    if parsed.descriptor is not None and parsed.name == parsed.descriptor.long:
        return "--" + parsed.name
    if len(parsed.name) == 1:
        return "-" + parsed.name
    return "--" + parsed.name


def diagnose(parsed, /):
    """
    classify one parsed occurrence.

    returns
    - UnrecognizedOptionError when no descriptor matched;
    - UnexpectedValueError when a valueless option carries a value;
    - MissingValueError when a required option has no value;
    - None when the occurrence is well-formed.

    the checks run in that order, so an unknown "--name=value" is reported
    as unrecognized, not as an unexpected value.
    """
    if not hasattr(parsed, "name") or not hasattr(parsed, "value") or not hasattr(parsed, "descriptor"):
        raise TypeError("diagnose() argument must be a parsed option")

    descriptor = parsed.descriptor
    if descriptor is None:
        return UnrecognizedOptionError(
            "unrecognized option `%s'" % parsed.name,
            title="unrecognized option",
            code=FaultCode.UNRECOGNIZED_OPTION,
            hint="check the spelling of %r" % _spelling(parsed),
            parsed=parsed,
        )

    if parsed.value is not None and descriptor.requirement is Requirement.NONE:
        return UnexpectedValueError(
            "option `%s' doesn't allow an argument" % parsed.name,
            title="unexpected argument",
            code=FaultCode.UNEXPECTED_VALUE,
            hint="remove everything from '=' (for example: %s)" % _spelling(parsed),
            parsed=parsed,
        )

    if parsed.value is None and descriptor.requirement is Requirement.REQUIRED:
        return MissingValueError(
            "option `%s' requires an argument" % parsed.name,
            title="missing argument",
            code=FaultCode.MISSING_VALUE,
            hint="pass a value after %r" % _spelling(parsed),
            parsed=parsed,
        )

    return None


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    - fault must provide __trigger__ and __replace__ methods.
    - options are merged into the fault via copy.replace() before triggering.
    - in shell mode the fault is printed to stderr; otherwise it is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "OptionFault",
    "UnrecognizedOptionError",
    "UnexpectedValueError",
    "MissingValueError",
    "diagnose",
    "trigger",
)
