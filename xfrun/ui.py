from docopt import docopt
from json import JSONEncoder
import re
import sys
from xfrun.channel import StreamTimeout
from xfrun.compose import compose
from xfrun.config import LAZY
from xfrun.reducer import arrayOf, countOf, sumOf, meanOf, joinedWith
from xfrun.transduce import run, transduce
from xfrun.transducers import \
    dedupe,        \
    distinct,      \
    dropping,      \
    droppingWhile, \
    filtering,     \
    identity,      \
    mapping,       \
    partitionAll,  \
    removing,      \
    takingNth,     \
    takingWhile,   \
    taking,        \
    tapping
from xfrun.util import chomp, consume, fmap, pbar, pipeline

json_encoder = JSONEncoder(ensure_ascii=False, sort_keys=True)
json_encode = lambda data: json_encoder.encode(data)

def render(value):
    if isinstance(value, str):
        return value
    return json_encode(value)

lines_printr = pipeline(fmap(render), fmap(print), consume)

UI_USAGE = """
xfrun

Runs lines of text through a chain of transducers.

Usage:
  xfrun [options] [<xform>...]
  xfrun --list

Options:
  --mode <mode>          Driver to use: eager, lazy or streaming [default: eager].
  --capacity <n>         Channel capacity of the streaming driver.
  --timeout <seconds>    How long the streaming driver waits for the next line.
  --reduce <reducer>     lines, json, count, sum, mean or join [default: lines].
  --sep <sep>            Separator used by --reduce join [default: ,].
  --input <file>         Read from file instead of stdin.
  --progress             Show a progress bar on stderr.
  --verbose              Trace every element reaching the reducer on stderr.
  --list                 List the available transducer steps.
"""

MAPPERS = {
    'upper': str.upper,
    'lower': str.lower,
    'strip': str.strip,
    'int': int,
    'float': float,
    'len': len,
}

def _regex(xform):
    def build(pattern):
        regex = re.compile(pattern)
        return xform(lambda x: regex.search(str(x)) is not None)
    return build

def _count(xform):
    def build(n):
        try:
            count = int(n)
        except ValueError:
            raise ValueError("Expected a number, got %r" % n)
        return xform(count)
    return build

def _mapper(name):
    if name not in MAPPERS:
        raise ValueError("Unknown map function %r, expected one of %s" % (name, ", ".join(sorted(MAPPERS))))
    return mapping(MAPPERS[name])

def _bare(xform):
    def build(arg):
        if arg:
            raise ValueError("%s takes no argument" % xform.__name__)
        return xform
    return build

XFORMS = {
    'map': (_mapper, 'upper|lower|strip|int|float|len'),
    'filter': (_regex(filtering), 'REGEX'),
    'remove': (_regex(removing), 'REGEX'),
    'take': (_count(taking), 'N'),
    'drop': (_count(dropping), 'N'),
    'take-while': (_regex(takingWhile), 'REGEX'),
    'drop-while': (_regex(droppingWhile), 'REGEX'),
    'nth': (_count(takingNth), 'N'),
    'partition': (_count(partitionAll), 'N'),
    'distinct': (_bare(distinct), None),
    'dedupe': (_bare(dedupe), None),
}

def parse_xform(token):
    (name, _, arg) = token.partition(':')
    if name not in XFORMS:
        raise ValueError("Unknown transducer step %r" % name)
    (builder, _) = XFORMS[name]
    return builder(arg)

def parse_reducer(name, sep):
    reducers = {
        'lines': arrayOf,
        'json': arrayOf,
        'count': countOf,
        'sum': sumOf,
        'mean': meanOf,
        'join': joinedWith(sep),
    }
    if name not in reducers:
        raise ValueError("Unknown reducer %r" % name)
    return reducers[name]

def xforms_printr():
    for name in sorted(XFORMS):
        (_, arg) = XFORMS[name]
        print(name if arg is None else "%s:%s" % (name, arg))

def trace(x):
    print("step", render(x), file=sys.stderr)

def optional(convert, value):
    if value is None:
        return None
    try:
        return convert(value)
    except ValueError:
        raise ValueError("Expected a number, got %r" % value)

def ui_main():
    result = xfrun_ui(sys.argv[1:], sys.stdin)
    exit(result)

def xfrun_ui(argv, stdin):
    args = docopt(UI_USAGE, argv)
    if args['--list']:
        xforms_printr()
        return 0
    try:
        steps = [parse_xform(token) for token in args['<xform>']]
        if args['--verbose']:
            steps.append(tapping(trace))
        xform = compose(*steps)
        reduce_as = args['--reduce']
        rf = parse_reducer(reduce_as, args['--sep'])
        mode = args['--mode']
        capacity = optional(int, args['--capacity'])
        timeout = optional(float, args['--timeout'])
        if args['--input']:
            with open(args['--input']) as fd:
                return _run(xform, rf, reduce_as, fd, mode, capacity, timeout, args['--progress'])
        return _run(xform, rf, reduce_as, stdin, mode, capacity, timeout, args['--progress'])
    except StreamTimeout as e:
        print("Timed out:", e, file=sys.stderr)
        return 2
    except ValueError as e:
        print("Error:", e, file=sys.stderr)
        return 1

def _run(xform, rf, reduce_as, fd, mode, capacity, timeout, progress):
    source = pipeline(fmap(chomp), pbar('xfrun', quiet=not progress))(fd)
    if mode == LAZY:
        elements = run(xform, source, mode=mode, channel_capacity=capacity, timeout=timeout)
        if reduce_as == 'lines':
            # Printed as they are pulled through, nothing is collected.
            lines_printr(elements)
            return 0
        result = transduce(identity, rf, elements)
    else:
        result = run(xform, source, rf, mode=mode, channel_capacity=capacity, timeout=timeout)
    if reduce_as == 'lines':
        lines_printr(result)
    else:
        print(render(result))
    return 0
