"""
taggrammar.py.

Subtag rules for RFC 5646 language tags (https://tools.ietf.org/html/bcp47).

Tags arrive here with every hyphen already turned into SEPARATOR.  The
classifier picks out grandfathered and private use tags; everything else
is handed to decompose(), which walks the subtags in grammar order:

    language [_extlang] [_script] [_region] *(_variant) *(_extension) [_privateuse]

Each subtag rule is a small predicate so that it can be checked on its own.
"""
import re
import enum

from tagerrors import InvalidFormat

SEPARATOR = '_'

# two extlang subtags at most after a 2-3 letter language
MAX_EXTLANGS = 2

# as registered; only the separator has been normalized
IRREGULAR = (
    'en_GB_oed',
    'i_ami',
    'i_bnn',
    'i_default',
    'i_enochian',
    'i_hak',
    'i_klingon',
    'i_lux',
    'i_mingo',
    'i_navajo',
    'i_pwn',
    'i_tao',
    'i_tay',
    'i_tsu',
    'sgn_BE_FR',
    'sgn_BE_NL',
    'sgn_CH_DE',
)

REGULAR = (
    'art_lojban',
    'cel_gaulish',
    'no_bok',
    'no_nyn',
    'zh_guoyu',
    'zh_hakka',
    'zh_min',
    'zh_min_nan',
    'zh_xiang',
)

_privateuse_regex = re.compile(r'[xX](_[a-zA-Z0-9]{1,8})+')

_language_regex = re.compile(r'[a-zA-Z]{2,8}')
_extlang_regex = re.compile(r'[a-zA-Z]{3}')
_script_regex = re.compile(r'[a-zA-Z]{4}')
_region_regex = re.compile(r'[a-zA-Z]{2}|[0-9]{3}')
_variant_regex = re.compile(r'[a-zA-Z0-9]{5,8}|[0-9][a-zA-Z0-9]{3}')
_singleton_regex = re.compile(r'[0-9a-wyzA-WYZ]')
_extension_regex = re.compile(r'[a-zA-Z0-9]{2,8}')
_private_regex = re.compile(r'[a-zA-Z0-9]{1,8}')


class TagKind(enum.IntEnum):
    LangTag = 1
    PrivateUse = 2
    GrandfatheredRegular = 3
    GrandfatheredIrregular = 4

    @property
    def grandfathered(self):
        return self in (TagKind.GrandfatheredRegular,
                        TagKind.GrandfatheredIrregular)


def is_language(s):
    """2-3 letter ISO 639 code, 4 letters (reserved) or 5-8 letters (registered)"""
    return _language_regex.fullmatch(s) is not None


def is_extlang(s):
    return _extlang_regex.fullmatch(s) is not None


def is_script(s):
    """ISO 15924 code"""
    return _script_regex.fullmatch(s) is not None


def is_region(s):
    """ISO 3166-1 alpha-2 code or UN M.49 code"""
    return _region_regex.fullmatch(s) is not None


def is_variant(s):
    return _variant_regex.fullmatch(s) is not None


def is_singleton(s):
    """Any single alphanumeric except x, which introduces private use"""
    return _singleton_regex.fullmatch(s) is not None


def is_extension_subtag(s):
    return _extension_regex.fullmatch(s) is not None


def is_private_prefix(s):
    return s in ('x', 'X')


def is_private_subtag(s):
    return _private_regex.fullmatch(s) is not None


def is_private_use_tag(tag):
    """Check whether a whole (separator-normalized) tag is a private use tag"""
    return _privateuse_regex.fullmatch(tag) is not None


def classify(tag):
    """
    Return the TagKind for a separator-normalized tag.

    Grandfathered tags are looked up before any grammar is applied since
    several of them (sgn_BE_FR, zh_min_nan, ...) would otherwise be
    rejected or misparsed.  Anything that is neither grandfathered nor
    private use is a langtag candidate; decompose() has the final word.
    """
    if tag in IRREGULAR:
        return TagKind.GrandfatheredIrregular
    if tag in REGULAR:
        return TagKind.GrandfatheredRegular
    if is_private_use_tag(tag):
        return TagKind.PrivateUse
    return TagKind.LangTag


class _SubtagReader(object):
    """Cursor over the subtags of one tag."""
    def __init__(self, tag):
        self._subtags = tag.split(SEPARATOR)
        self._pos = 0

    def peek(self):
        if self._pos < len(self._subtags):
            return self._subtags[self._pos]
        return None

    def take(self, rule):
        """Consume and return the next subtag if rule accepts it."""
        subtag = self.peek()
        if subtag is not None and rule(subtag):
            self._pos += 1
            return subtag
        return None

    def take_all(self, rule, limit=None):
        taken = []
        while limit is None or len(taken) < limit:
            subtag = self.take(rule)
            if subtag is None:
                break
            taken.append(subtag)
        return taken

    def exhausted(self):
        return self._pos == len(self._subtags)


def decompose(tag):
    """
    Split a langtag into its raw subtag captures.

    Returns a dict with keys language, extlang, script, region, variants,
    extensions and private_use.  Missing single subtags are None; the
    repeating ones are lists.  extensions is the flat run of singletons
    and their values, see group_extensions().  Raises InvalidFormat if
    any part of the tag is left over.
    """
    reader = _SubtagReader(tag)

    language = reader.take(is_language)
    if language is None:
        raise InvalidFormat(tag)
    extlang = []
    if len(language) <= 3:
        extlang = reader.take_all(is_extlang, MAX_EXTLANGS)

    script = reader.take(is_script)
    region = reader.take(is_region)
    variants = reader.take_all(is_variant)

    extensions = []
    while True:
        singleton = reader.take(is_singleton)
        if singleton is None:
            break
        values = reader.take_all(is_extension_subtag)
        if not values:
            raise InvalidFormat(tag)
        extensions.append(singleton)
        extensions.extend(values)

    private_use = []
    if reader.take(is_private_prefix) is not None:
        private_use = reader.take_all(is_private_subtag)
        if not private_use:
            raise InvalidFormat(tag)

    if not reader.exhausted():
        raise InvalidFormat(tag)

    return {
        'language': language,
        'extlang': extlang,
        'script': script,
        'region': region,
        'variants': variants,
        'extensions': extensions,
        'private_use': private_use,
    }


def group_extensions(tokens, tag=''):
    """
    Regroup the flat extension run into {singleton: value}.

    A one-character token opens a new group; the longer tokens that follow
    are appended to it, each with a leading SEPARATOR, so that
    singleton + value gives back the extension (u + _islamcal).  A
    singleton may appear only once per tag, regardless of case.
    """
    groups = {}
    seen = set()
    key = None
    for token in tokens:
        if len(token) == 1:
            if token.lower() in seen:
                raise InvalidFormat(tag)
            seen.add(token.lower())
            key = token
            groups[key] = ''
            continue
        if key is None:
            raise InvalidFormat(tag)
        groups[key] += SEPARATOR + token
    return groups
