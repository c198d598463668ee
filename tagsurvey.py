"""
Survey the language tags found in a set of files.

Input is either plain lists of tags (one per line, optionally
lzma-compressed) or, with -H, HTML documents whose lang, xml:lang,
hreflang and content-language meta values get extracted.  Each tag is
parsed and the counts by kind, language, region, script and private use
subtag are printed as JSON, along with the raw strings that didn't parse.
"""
import sys
import argparse
import lzma
from collections import Counter
from json import dumps

from bs4 import BeautifulSoup as bs

from langtag import parse
from tagerrors import InvalidFormat

PARSER = "html.parser"


def _open(fname):
    if fname.endswith('.xz'):
        return lzma.open(fname, 'rt', encoding='utf8')
    return open(fname, encoding='utf8')


def read_tags(fname):
    """Yield the tags listed in a text file, skipping blanks and # comments."""
    with _open(fname) as infile:
        for line in infile:
            line = line.strip()
            if not line or line.startswith('#'):
                continue
            yield line


def _check_explicit_lang_tag(el):
    lfound = []
    for attr in ('lang', 'xml:lang', 'hreflang'):
        if attr in el.attrs:
            lfound.append(el.attrs[attr].strip())
    if el.name == 'meta':
        xdict = {key.lower(): val for key, val in el.attrs.items()}
        if xdict.get('http-equiv', '').lower() == 'content-language':
            lfound.append(xdict.get('content', '').strip())
    return lfound


def extract_html_tags(content):
    """Return every language tag declared in an HTML document, in order."""
    soup = bs(content, PARSER)
    found = []
    for el in soup.find_all(True):
        for value in _check_explicit_lang_tag(el):
            # content-language may carry a list
            found.extend(s.strip() for s in value.split(',') if s.strip())
    return found


def read_html_tags(fname):
    with _open(fname) as infile:
        return extract_html_tags(infile.read())


class TagSurvey(object):
    """Running counts over a stream of raw tag strings."""
    def __init__(self):
        self.kinds = Counter()
        self.language = Counter()
        self.region = Counter()
        self.script = Counter()
        self.private = Counter()
        self.invalid = Counter()

    @property
    def total(self):
        return sum(self.kinds.values()) + sum(self.invalid.values())

    def add(self, s):
        """Count one raw tag; return the parsed Tag or None if malformed."""
        try:
            tag = parse(s)
        except InvalidFormat:
            self.invalid[s] += 1
            return None

        self.kinds[tag.kind.name] += 1
        fields = tag.as_dict()
        if tag.is_langtag():
            self.language[tag.primary_language] += 1
            if fields['region']:
                self.region[fields['region']] += 1
            if fields['script']:
                self.script[fields['script']] += 1
        if fields.get('privateuse'):
            self.private[fields['privateuse'].replace('_', '-')] += 1
        return tag

    def update(self, tags):
        for s in tags:
            self.add(s)

    def report(self, outfile=None):
        if outfile is None:
            outfile = sys.stdout
        print("# total {} invalid {}".format(
            self.total, sum(self.invalid.values())), file=outfile)
        for name in ('kinds', 'language', 'region', 'script', 'private',
                     'invalid'):
            print("# {}".format(name), file=outfile)
            print(dumps(dict(getattr(self, name))), file=outfile)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Count the language tags found in a set of files.')
    parser.add_argument('files', nargs='+', help='Input files')
    parser.add_argument('-H', '--html', dest='html', action='store_true',
                        default=False,
                        help='Inputs are HTML; extract tags from attributes')
    parser.add_argument('-o', '--outfile', dest='outfile', type=str,
                        default='stdout',
                        help='Output file')
    parser.add_argument('-v', '--verbose', dest='verbose', action='count',
                        default=0, help='Turn on verbose output.')
    args = parser.parse_args(argv)

    survey = TagSurvey()
    for fname in args.files:
        try:
            tags = read_html_tags(fname) if args.html else read_tags(fname)
            for s in tags:
                tag = survey.add(s)
                if args.verbose:
                    print("{} -> {}".format(
                        s, tag if tag is not None else 'INVALID'))
        except OSError as e:
            print("Failed to read {}: {}".format(fname, e), file=sys.stderr)
            return 1

    if args.outfile == 'stdout':
        survey.report()
    else:
        with open(args.outfile, 'w') as outfile:
            survey.report(outfile)
    return 0


if __name__ == '__main__':
    sys.exit(main())
