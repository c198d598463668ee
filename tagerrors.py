"""
Exceptions raised by the language tag engine.

Construction raises InvalidFormat; the subtag accessors raise
MissingSubtag or NotApplicable.
"""

RFC5646_SYNTAX = "https://datatracker.ietf.org/doc/html/rfc5646#section-2.1"


class LangTagError(Exception):
    """Base class for everything the engine raises."""


class InvalidFormat(LangTagError, ValueError):
    """The string matches none of the four tag grammars."""

    def __init__(self, tag):
        self.tag = tag
        super().__init__("Invalid locale format: {}. Check {}.".format(
            tag, RFC5646_SYNTAX))


class MissingSubtag(LangTagError, LookupError):
    """A langtag that simply doesn't carry the requested subtag."""

    def __init__(self, key, tag):
        self.key = key
        self.tag = tag
        super().__init__("Tag {} does not have a subtag {}.".format(tag, key))


class NotApplicable(LangTagError):
    """Grandfathered and private use tags never have the requested subtag."""

    def __init__(self, key):
        self.key = key
        super().__init__(
            "Grandfathered and private use tags are missing tag {}.".format(key))
