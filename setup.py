#!/usr/bin/env python
from setuptools import setup

requires = ['func_prototypes', 'docopt', 'delnone', 'tqdm']
test_requires = ['tox', 'pytest', 'tabulate']

setup(
    name='xfrun',
    version='0.1.0',
    author='Andrew Thomson',
    author_email='athomsonguy@gmail.com',
    packages=['xfrun'],
    install_requires = requires,
    extras_require = {'test': test_requires},
    entry_points = {
      'console_scripts': [
        'xfrun = xfrun.ui:ui_main',
        ],
    },
    license='MIT',
    description='transducer runtime: composable reducing function pipelines over lists, iterators and channels.',
    long_description_content_type='text/markdown',
    long_description=open('README.md').read(),
    classifiers=[
        'Development Status :: 3 - Alpha',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
    ],
)
