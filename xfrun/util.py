import tqdm

def identity(x):
    return x

def fmap(func):
    def mapped(collection):
        return map(func, collection)
    mapped.__name__ = "mapped_" + func.__name__
    return mapped

def consume(collection):
    for _ in collection:
        pass

def pipeline(*funcs):
    if funcs:
        foo = funcs[0]
        rest = funcs[1:]
        if rest:
            next_hop = pipeline(*rest)
            def pipe(*args, **kwargs):
                return next_hop(foo(*args, **kwargs))
            return pipe
        else:  # no rest, foo is final function.
            return foo
    else:  # no funcs at all.
        return fmap(identity)

def chomp(line):
    return line.rstrip('\r\n')

def pbar(label='', quiet=False):
    """Wraps an iterable in a tqdm progress bar on stderr."""
    def _pbar(xs):
        with tqdm.tqdm(xs, desc=label, disable=quiet, leave=False, unit='elem') as bar:
            for x in bar:
                yield x
    return _pbar
