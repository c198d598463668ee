"""
validlang.py.

Utility module to check whether a language tag is well-formed according
to BCP47 (https://tools.ietf.org/html/bcp47) but not if it is valid,
i.e., subtags aren't looked up in any registry.
"""
from langtag import parse
from tagerrors import InvalidFormat


def is_valid(s):
    """Check whether s parses as a language tag; never raises."""
    if not s:
        return False
    try:
        parse(s)
    except InvalidFormat:
        return False
    return True


def well_formed_bcp47(s):
    """Return the subtag fields of a well-formed tag as a dict, else None"""
    try:
        tag = parse(s)
    except InvalidFormat:
        return None
    return tag.as_dict()


if __name__ == '__main__':
    import sys
    print("> ", end='', flush=True)
    line = sys.stdin.readline()
    while line:
        tag = line.strip()
        result = well_formed_bcp47(tag)
        print(result)
        print("> ", end='', flush=True)
        line = sys.stdin.readline()
