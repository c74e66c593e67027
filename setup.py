"""The edfstream package.
Streaming conversion of EDF biosignal recordings to JSON and SQL.
"""

# Always prefer setuptools over distutils
from setuptools import setup, find_packages
# To use a consistent encoding
from codecs import open
from os import path

here = path.abspath(path.dirname(__file__))

# Get the long description from the README file
with open(path.join(here, 'README.rst'), encoding='utf-8') as f:
    long_description = f.read()

# Get the version number from the version.py file
with open(path.join(here, 'edfstream', 'version.py')) as f:
    __version__ = f.read().split()[-1].strip("'")

setup(
    name='edfstream',

    # Versions should comply with PEP440. For a discussion on single-sourcing
    # the version across setup.py and the project code, see
    # https://packaging.python.org/en/latest/single_source_version.html
    version=__version__,

    description='Streaming EDF decoder with JSON and SQL export',
    long_description=long_description,

    # Choose your license
    license='MIT',

    # What does your project relate to?
    keywords='EDF biosignal physiological waveform',

    packages=find_packages(exclude=['tests', 'tests.*']),

    python_requires='>=3.8',

    # List run-time dependencies here.  These will be installed by pip when
    # your project is installed. For an analysis of "install_requires" vs pip's
    # requirements files see:
    # https://packaging.python.org/en/latest/requirements.html
    install_requires=[
        'fsspec>=2023.1.0',
        'numpy>=1.22.0',
        'pandas>=2.0.0',
        'SQLAlchemy>=2.0.0',
    ],

    # List additional groups of dependencies here (e.g. development
    # dependencies). You can install these using the following syntax,
    # for example:
    # $ pip install -e .[test]
    extras_require={
        'test': ['pytest>=7.0.0']
    },

    # Add ways to quickly filter project
    classifiers=[
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License"
    ],
)
