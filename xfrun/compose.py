from xfrun.transducers import identity

# compose(a, b, ...)(rf) == a(b(...(rf))). The wrapping is built inside out,
# so at run time an element meets a's step first, then b's, down to rf.


def _comp_0():
    return identity


def _comp_1(a):
    return a


def _comp_2(a, b):
    def _composed2(rf):
        return a(b(rf))

    return _composed2


def _comp_3(a, b, c):
    def _composed3(rf):
        return a(b(c(rf)))

    return _composed3


def _comp_4(a, b, c, d):
    def _composed4(rf):
        return a(b(c(d(rf))))

    return _composed4


def _comp_5(a, b, c, d, e):
    def _composed5(rf):
        return a(b(c(d(e(rf)))))

    return _composed5


def _comp_6(a, b, c, d, e, f):
    def _composed6(rf):
        return a(b(c(d(e(f(rf))))))

    return _composed6


def _comp_7(a, b, c, d, e, f, g):
    def _composed7(rf):
        return a(b(c(d(e(f(g(rf)))))))

    return _composed7


def _comp_8(a, b, c, d, e, f, g, h):
    def _composed8(rf):
        return a(b(c(d(e(f(g(h(rf))))))))

    return _composed8


_comp_fns = [
    _comp_0,
    _comp_1,
    _comp_2,
    _comp_3,
    _comp_4,
    _comp_5,
    _comp_6,
    _comp_7,
    _comp_8,
]


def _comp_n(*xforms):
    def _composed(rf):
        for xform in reversed(xforms):
            rf = xform(rf)
        return rf

    return _composed


def compose(*xforms):
    """
    Composes transducers. Elements flow through them in the order they are
    written: compose(filtering(odd), mapping(inc)) filters, then increments.
    With no transducers this is identity.
    """
    n = len(xforms)
    if n < len(_comp_fns):
        return _comp_fns[n](*xforms)
    return _comp_n(*xforms)
