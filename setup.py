#!/usr/bin/env python
# -*- encoding: utf-8 -*-

import itertools as it

from setuptools import setup, find_packages

# setuptools only specifies abstract requirements
base_requirements = [
    'numpy',
    'scipy',
    'click',
    'tabulate',
    'eliot',
]

# extras requirements list
test_requirements = [
    'pytest',
    'pytest-mock',
]

dev_requirements = [
    'nox',
]

# # combination of all the extras requirements
all_requirements = list(it.chain.from_iterable([
    base_requirements,
    test_requirements,
    dev_requirements,
]))

setup(
    name='cellres',
    version='0.1.0',
    description="Cell resampling of collision events with negative weights",
    license="MIT",
    classifiers=[
        "Topic :: Scientific/Engineering :: Physics",
        "License :: OSI Approved :: MIT License",
        'Programming Language :: Python :: 3'
    ],
    python_requires='>=3.8',

    # package
    packages=find_packages(where='src'),

    package_dir={'' : 'src'},

    entry_points={
        'console_scripts' : [
            'cellres=cellres.cli:cli',
        ],
    },

    install_requires=base_requirements,

    extras_require={
        'test' : test_requirements,
        'dev' : dev_requirements,
        'all' : all_requirements,
    }
)
