#!/usr/bin/env python3

from setuptools import setup

setup(
    name="stegchunk",
    version="1.0.0",
    description='Hide, read and remove messages in PNG chunks',
    long_description="""A pure python package and command line tool to embed text messages
    in ancillary PNG chunks, and to find and remove them again""",
    license='GPL-3.0',
    classifiers=[
        #   3 - Alpha
        #   4 - Beta
        #   5 - Production/Stable
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Topic :: Software Development :: Libraries',
        'License :: OSI Approved :: GNU General Public License (GPL)',
        'Programming Language :: Python :: 3',
    ],
    keywords='png library steganography chunk',
    packages=["stegchunk"],
    install_requires=['requests'],
    extras_require={'test': ['pytest']},
    python_requires='>=3.9',
    entry_points={
        'console_scripts': ['stegchunk=stegchunk.cli:main'],
    },
)
