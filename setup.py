#!/usr/bin/env python
from setuptools import setup, find_packages
import os
import re

# Read the version from __init__.py
with open(os.path.join('outline_ai', '__init__.py'), 'r') as f:
    version_match = re.search(r"^__version__ = ['\"]([^'\"]*)['\"]", f.read(), re.M)
    if version_match:
        version = version_match.group(1)
    else:
        version = '0.1.0'  # Default if not found

# Read long description from README.md
with open('README.md', 'r', encoding='utf-8') as f:
    long_description = f.read()

# Core dependencies
install_requires = [
    'numpy>=1.22.0',  # Board arrays
    'rich>=12.0.0',  # Terminal rendering and logging
    'tqdm>=4.64.0,<5.0.0',  # Progress bars
]

# Development dependencies
dev_requires = [
    'pytest>=7.0.0',  # Testing framework
    'pytest-cov>=4.0.0',  # Test coverage
]

setup(
    name='outline-ai',
    version=version,
    description='A bitboard rules engine and MCTS player for the board game Outline Four',
    long_description=long_description,
    long_description_content_type='text/markdown',
    author='Outline AI Team',
    packages=find_packages(include=['outline_ai', 'outline_ai.*']),
    install_requires=install_requires,
    extras_require={
        'dev': dev_requires,
        'test': dev_requires,
    },
    entry_points={
        'console_scripts': [
            'outline-play=outline_ai.play:main',
            'outline-arena=outline_ai.arena:main',
        ],
    },
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Topic :: Games/Entertainment :: Board Games',
        'Topic :: Scientific/Engineering :: Artificial Intelligence',
    ],
    python_requires='>=3.9',
    include_package_data=True,
    keywords='board game, ai, mcts, monte carlo tree search, bitboard',
)
