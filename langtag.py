"""
langtag.py.

Parse, classify and canonicalize IETF language tags (RFC 5646).

    >>> t = parse('zh-hant-cn')
    >>> str(t)
    'zh-Hant-CN'
    >>> t.use_underscore().region
    'CN'

A tag is one of three classes: LangTag, PrivateUseTag or GrandfatheredTag
(regular or irregular).  All of them keep their canonical form with
underscores internally and only swap in the preferred separator when the
tag, or one of its subtags, is rendered.
"""
import re
import sys
import enum
import json
import argparse

import taggrammar
from taggrammar import SEPARATOR, TagKind
from tagerrors import InvalidFormat, MissingSubtag, NotApplicable, LangTagError

_separator_run = re.compile(re.escape(SEPARATOR) + '{2,}')


class Separator(enum.Enum):
    DASH = '-'
    UNDERSCORE = '_'


def _collapse(s):
    return _separator_run.sub(SEPARATOR, s)


class Tag(object):
    """
    Common base for the three kinds of tag.

    The structural accessors all raise NotApplicable here; LangTag and
    PrivateUseTag override the ones that make sense for them.
    """
    kind = None

    def __init__(self, raw, separator=Separator.DASH):
        self._raw = raw
        self._separator = Separator(separator)
        self._canonical = _collapse(raw.lower())

    @property
    def raw(self):
        """The tag as given, hyphens replaced by underscores"""
        return self._raw

    @property
    def canonical(self):
        """Canonical form, always underscore-separated"""
        return self._canonical

    @property
    def separator(self):
        return self._separator

    @property
    def tag(self):
        return self.format()

    def use_dash(self):
        self._separator = Separator.DASH
        return self

    def use_underscore(self):
        self._separator = Separator.UNDERSCORE
        return self

    def format(self, separator=None):
        """Render the canonical form with the given (or preferred) separator"""
        return self._render(self._canonical, separator)

    def _render(self, s, separator=None):
        if separator is None:
            separator = self._separator
        return s.replace(SEPARATOR, Separator(separator).value)

    def is_langtag(self):
        return self.kind == TagKind.LangTag

    def is_private_use(self):
        return self.kind == TagKind.PrivateUse

    def is_grandfathered(self):
        return self.kind.grandfathered

    def is_grandfathered_regular(self):
        return self.kind == TagKind.GrandfatheredRegular

    def is_grandfathered_irregular(self):
        return self.kind == TagKind.GrandfatheredIrregular

    @property
    def language(self):
        raise NotApplicable('language')

    @property
    def extlang(self):
        raise NotApplicable('extlang')

    @property
    def script(self):
        raise NotApplicable('script')

    @property
    def region(self):
        raise NotApplicable('region')

    @property
    def variants(self):
        raise NotApplicable('variants')

    @property
    def extensions(self):
        raise NotApplicable('extensions')

    def extension(self, key):
        raise NotApplicable('extensions')

    @property
    def private_use(self):
        raise NotApplicable('privateUse')

    def as_dict(self):
        """Subtag fields as a plain dict; anything absent is None."""
        return {'kind': self.kind.name, 'tag': self.format()}

    def __str__(self):
        return self.format()

    def __repr__(self):
        return "{}({!r})".format(self.__class__.__name__, self.format())

    def __eq__(self, other):
        if not isinstance(other, Tag):
            return NotImplemented
        return self.kind == other.kind and self._canonical == other._canonical

    def __hash__(self):
        return hash((self.kind, self._canonical))


class GrandfatheredTag(Tag):
    """A registered legacy tag; nothing inside it is addressable."""
    def __init__(self, raw, kind, separator=Separator.DASH):
        if not kind.grandfathered:
            raise ValueError("Not a grandfathered kind: {}".format(kind))
        super().__init__(raw, separator)
        self.kind = kind


class PrivateUseTag(Tag):
    kind = TagKind.PrivateUse

    def __init__(self, raw, separator=Separator.DASH):
        super().__init__(raw, separator)
        self._private_use = tuple(self._canonical.split(SEPARATOR)[1:])

    @property
    def private_use(self):
        return self._render(SEPARATOR.join(('x',) + self._private_use))

    def as_dict(self):
        d = super().as_dict()
        d['privateuse'] = self.private_use
        return d


class LangTag(Tag):
    """
    A standard language tag, decomposed into its subtags.

    Casing follows RFC 5646 conventions: language, extlang, variants,
    extensions and private use subtags in lowercase, script in titlecase,
    region in uppercase.
    """
    kind = TagKind.LangTag

    def __init__(self, raw, separator=Separator.DASH, language='', extlang=(),
                 script=None, region=None, variants=(), extensions=None,
                 private_use=()):
        super().__init__(raw, separator)
        self._language = language.lower()
        self._extlang = tuple(s.lower() for s in extlang)
        self._script = script.capitalize() if script else None
        self._region = region.upper() if region else None
        self._variants = tuple(v.lower() for v in variants)
        self._extensions = {}
        for key, value in (extensions or {}).items():
            self._extensions[key.lower()] = value.lower()
        self._private_use = tuple(s.lower() for s in private_use)
        self._canonical = self._purify()

    def _purify(self):
        parts = [
            self._language_with_extlang(),
            self._script or '',
            self._region or '',
            SEPARATOR.join(self._variants),
        ]
        tag = SEPARATOR.join(p for p in parts if p)
        for key, value in self._extensions.items():
            tag += SEPARATOR + key + SEPARATOR + value
        if self._private_use:
            tag += SEPARATOR + 'x' + SEPARATOR + SEPARATOR.join(self._private_use)
        return _collapse(tag)

    def _language_with_extlang(self):
        return SEPARATOR.join((self._language,) + self._extlang)

    def _missing(self, key):
        return MissingSubtag(key, self.format())

    @property
    def language(self):
        """Primary language subtag, followed by any extlang subtags"""
        return self._render(self._language_with_extlang())

    @property
    def primary_language(self):
        return self._language

    @property
    def extlang(self):
        if not self._extlang:
            raise self._missing('extlang')
        return self._render(SEPARATOR.join(self._extlang))

    @property
    def script(self):
        if self._script is None:
            raise self._missing('script')
        return self._script

    @property
    def region(self):
        if self._region is None:
            raise self._missing('region')
        return self._region

    @property
    def variants(self):
        if not self._variants:
            raise self._missing('variants')
        return list(self._variants)

    @property
    def extensions(self):
        """All extensions (singleton + value) in order of appearance"""
        if not self._extensions:
            raise self._missing('extensions')
        return [self.extension(key) for key in self._extensions]

    def extension(self, key):
        value = self._extensions.get(key.lower())
        if value is None:
            raise self._missing('extension:{}'.format(key))
        return self._render(key.lower() + value)

    @property
    def private_use(self):
        if not self._private_use:
            raise self._missing('privateUse')
        return self._render(SEPARATOR.join(('x',) + self._private_use))

    def as_dict(self):
        d = super().as_dict()
        d.update({
            'language': self.language,
            'extlang': self._render(SEPARATOR.join(self._extlang)) or None,
            'script': self._script,
            'region': self._region,
            'variants': list(self._variants),
            'extensions': {k: self.extension(k) for k in self._extensions},
            'privateuse': None,
        })
        if self._private_use:
            d['privateuse'] = self.private_use
        return d


def parse(s):
    """
    Build a Tag from a string, with either - or _ as separator.

    The tag keeps using underscores if the input had any, dashes
    otherwise.  Raises InvalidFormat if s isn't a well-formed tag.
    """
    if not isinstance(s, str) or not s:
        raise InvalidFormat(s)

    separator = Separator.UNDERSCORE if SEPARATOR in s else Separator.DASH
    normalized = s.replace(Separator.DASH.value, SEPARATOR)

    kind = taggrammar.classify(normalized)
    if kind.grandfathered:
        return GrandfatheredTag(normalized, kind, separator)
    if kind == TagKind.PrivateUse:
        return PrivateUseTag(normalized, separator)

    fields = taggrammar.decompose(normalized)
    fields['extensions'] = taggrammar.group_extensions(
        fields['extensions'], normalized)
    return LangTag(normalized, separator, **fields)


def _show(tag, args):
    if args.underscore:
        tag.use_underscore()
    elif args.dash:
        tag.use_dash()
    if args.json:
        return json.dumps(tag.as_dict())
    return tag.format()


def _handle(s, args):
    try:
        tag = parse(s)
    except LangTagError as e:
        print(e, file=sys.stderr)
        return False
    print(_show(tag, args))
    return True


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Canonicalize IETF language tags.')
    parser.add_argument('tags', nargs='*',
                        help='Tags to canonicalize; read stdin if none given')
    parser.add_argument('-d', '--dash', dest='dash', action='store_true',
                        default=False, help='Render with dashes')
    parser.add_argument('-u', '--underscore', dest='underscore',
                        action='store_true', default=False,
                        help='Render with underscores')
    parser.add_argument('-j', '--json', dest='json', action='store_true',
                        default=False, help='Print subtag fields as JSON')
    args = parser.parse_args(argv)

    ok = True
    if args.tags:
        for s in args.tags:
            ok = _handle(s, args) and ok
        return 0 if ok else 1

    print("> ", end='', flush=True)
    line = sys.stdin.readline()
    while line:
        s = line.strip()
        if s:
            ok = _handle(s, args) and ok
        print("> ", end='', flush=True)
        line = sys.stdin.readline()
    return 0 if ok else 1


if __name__ == '__main__':
    sys.exit(main())
