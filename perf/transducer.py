import functools
import timeit
from tabulate import tabulate
from xfrun.compose import compose
from xfrun.reducer import arrayOf, reducer, sumOf
from xfrun.transduce import reduceWith, transduce, xiter
from xfrun.channel import stream_transduce
from xfrun.transducers import filtering, mapping, taking

def isEven(n):
    return n % 2 == 0

def inc(x):
    return x + 1

def square(x):
    return x * x

def plus(x, y):
    return x + y

# args example: partial(inc_square_comprehension, hundredK)
# kwargs example number=1000
def performance_compare(*cases, case_args=[], timeit_kwargs={}):
    results = {}
    for case in cases:
        name = case.__name__
        case = functools.partial(case, *case_args)
        time = timeit.timeit(case, **timeit_kwargs)
        results[name] = time
    lowest = min([time for time in results.values()])
    table = [(name, time, "%.2f" % (time / lowest)) for (name, time) in results.items()]
    print(tabulate(table, headers=['case', 'time', 'scale']))

def inc_square_comprehension(nums):
    return [(num + 1) * (num + 1) for num in nums]

def inc_square_loop(nums):
    out = []
    for n in nums:
        out.append((n + 1) * (n + 1))
    return out

inc_square = compose(mapping(inc), mapping(square))

def inc_square_transduce(nums):
    return transduce(inc_square, arrayOf, nums)

def inc_square_xiter(nums):
    return list(xiter(inc_square, nums))

def inc_square_stream(nums):
    return stream_transduce(inc_square, arrayOf, nums, capacity=64)

def sum_even_builtin(nums):
    return sum(filter(isEven, nums))

def sum_even_transduce(nums):
    return transduce(filtering(isEven), sumOf, nums)

def sum_functools_reduce(nums):
    return functools.reduce(plus, nums, 0)

def sum_reduceWith(nums):
    return reduceWith(reducer(plus), 0, nums)

def head_slice(nums):
    return list(nums)[:10]

def head_taking(nums):
    return transduce(taking(10), arrayOf, nums)


hundredK = range(100000)

def test_inc_square():
    performance_compare(inc_square_comprehension,
                        inc_square_loop,
                        inc_square_transduce,
                        inc_square_xiter,
                        case_args=[hundredK],
                        timeit_kwargs={'number': 10})

def test_stream():
    performance_compare(inc_square_transduce,
                        inc_square_stream,
                        case_args=[hundredK],
                        timeit_kwargs={'number': 1})

def test_sum_even():
    performance_compare(sum_even_builtin,
                        sum_even_transduce,
                        case_args=[hundredK],
                        timeit_kwargs={'number': 10})

def test_reduce():
    performance_compare(sum_functools_reduce,
                        sum_reduceWith,
                        case_args=[hundredK],
                        timeit_kwargs={'number': 10})

def test_early_termination():
    performance_compare(head_slice,
                        head_taking,
                        case_args=[hundredK],
                        timeit_kwargs={'number': 100})
