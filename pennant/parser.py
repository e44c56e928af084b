"""
Pennant parsing engine: one left-to-right pass over the tokens of one command.

Phases
- scan: classify each token and resolve it.
  • long/short: look the flag up, then take its value with one token of
    lookahead (a value is only ever a positional token).
  • cluster (-abc): every character but the last must be a boolean flag and is
    set by presence; the last one follows the single-flag rule.
  • positional: the wild flag at the positional cursor takes it; without one
    the raw token overflows into `remaining`. The cursor advances either way.
- sweep: after a clean scan, every flag no token referred to gets an
  informational diagnostic (the help flag is exempt).

Faults
- Recoverable ones (missing or invalid value) are reported to the command as
  they happen and the flag keeps its default.
- A fatal one (unknown flag, non-boolean flag inside a cluster) stops the
  scan and is returned to the command, which owns the on_error hook.

Positions in messages are 1-based ordinals over the whole prompt ("at third
position"), so children continue counting after their parent's tokens.
"""
import difflib
import functools

from .faults import *
from .kinds import CoercionError
from .tokens import TokenKind, classify, positional


@functools.cache
def _ordinal(number):
    """
    Return a human-friendly ordinal label for a 1-based position.

    - 1..10 are rendered as words ("first"…"tenth").
    - Other numbers use numeric ordinals with English suffixes.
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    if 10 < number % 100 < 20:
        return f"{number}th"

    return f"{number}%s" % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


class Parser:
    """
    Single-use scanner bound to a command and its token sequence.

    Attributes
    - cursor: index of the next token to read.
    - position: positional cursor, the index of the next wild flag.
    - remaining: positional tokens no wild flag took, in order.
    """

    def __init__(self, command, tokens, /, offset=0):
        self._command = command
        self._registry = command.registry
        self._tokens = list(tokens)
        self._offset = offset
        self.cursor = 0
        self.position = 0
        self.remaining = []

    @property
    def route(self):
        return " ".join(step.name for step in self._command.path)

    def _where(self, cursor):
        return _ordinal(self._offset + cursor + 1)

    def _peek(self):
        try:
            return self._tokens[self.cursor]
        except IndexError:
            return None

    def _unknown(self, spelling, cursor):
        names = []
        for flag in self._registry.named:
            if flag.short is not None:
                names.append("-" + flag.short)
            if flag.long is not None:
                names.append("--" + flag.long)
        suggestions = difflib.get_close_matches(spelling, names, 5)
        try:
            hint = "did you mean %r? you can also run '%s --help' to see all flags" % (suggestions[0], self.route)
        except IndexError:
            hint = "try '%s --help' to see all available flags" % self.route
        return UnknownFlagError(
            "unknown flag %r at %s position" % (spelling, self._where(cursor)),
            flag=spelling,
            index=cursor,
            suggestions=suggestions,
            hint=hint,
            docs=getdoc(FaultCode.UNKNOWN_FLAG),
        )

    def _assign(self, flag, text, cursor):
        """
        coerce text into the flag; an invalid value leaves the default in place.
        """
        try:
            flag.parse(text)
        except CoercionError as error:
            self._command.report(InvalidValueWarning(
                "%r set to default because the value is invalid (validation error: %s)" % (flag.id, error),
                flag=flag.id,
                index=cursor,
                reason=error.reason,
                hint="run '%s --help' to see what %r accepts" % (self.route, flag.id),
                docs=getdoc(FaultCode.INVALID_VALUE),
            ))

    def _resolve(self, flag, spelling, cursor):
        """
        single-flag rule, shared by -x, --name and the last flag of a cluster.
        """
        if flag is None:
            return self._unknown(spelling, cursor)

        flag.refer()
        lookahead = self._peek()
        if flag.boolean:
            if lookahead is not None and positional(lookahead):
                self.cursor += 1
                self._assign(flag, lookahead, self.cursor - 1)
            else:
                flag.present()
        elif lookahead is None or not positional(lookahead):
            self._command.report(MissingValueWarning(
                "%r set to default because the value is missing" % flag.id,
                flag=flag.id,
                index=cursor,
                hint="pass a %s value after %r" % (flag.kind, spelling),
                docs=getdoc(FaultCode.MISSING_VALUE),
            ))
        else:
            self.cursor += 1
            self._assign(flag, lookahead, self.cursor - 1)
        return None

    def _parse_long(self, name, cursor):
        return self._resolve(self._registry.find_by_long(name), "--" + name, cursor)

    def _parse_short(self, name, cursor):
        if len(name) == 1:
            return self._resolve(self._registry.find_by_short(name), "-" + name, cursor)

        *heads, last = name
        for char in heads:
            if (flag := self._registry.find_by_short(char)) is None:
                return self._unknown("-" + char, cursor)
            if not flag.boolean:
                return GroupedNonBooleanError(
                    "flag '-%s' should be boolean because it's inside a group of flags and it's not the last flag" % char,
                    flag=flag.id,
                    index=cursor,
                    hint="move '-%s' to the end of '-%s' or pass it on its own" % (char, name),
                    docs=getdoc(FaultCode.GROUPED_NON_BOOLEAN),
                )
            flag.refer()
            flag.present()
        return self._resolve(self._registry.find_by_short(last), "-" + last, cursor)

    def _parse_wild(self, token, cursor):
        flag = self._registry.find_by_index(self.position)
        self.position += 1
        if flag is None:
            self.remaining.append(token)
            return None
        flag.refer()
        self._assign(flag, token, cursor)
        return None

    def _sweep(self):
        help = self._registry.help_index()
        for index, flag in enumerate(self._registry.named):
            if index != help and not flag.referred:
                self._untouched(flag)
        for flag in self._registry.wild:
            if not flag.referred:
                self._untouched(flag)

    def _untouched(self, flag):
        self._command.report(NotReferredWarning(
            "%r set to default because it's not referred" % flag.id,
            flag=flag.id,
            docs=getdoc(FaultCode.NOT_REFERRED),
        ))

    def run(self):
        """
        scan every token, then sweep; return the fatal fault that stopped the
        scan, or None.
        """
        while (token := self._peek()) is not None:
            cursor = self.cursor
            self.cursor += 1
            kind, name = classify(token)
            match kind:
                case TokenKind.LONG:
                    fault = self._parse_long(name, cursor)
                case TokenKind.SHORT:
                    fault = self._parse_short(name, cursor)
                case _:
                    fault = self._parse_wild(token, cursor)
            if fault is not None:
                return fault
        self._sweep()
        return None


__all__ = (
    "Parser",
)
