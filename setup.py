# setup.py
from setuptools import setup, find_packages

setup(
    name="yial",
    version="0.3.0",
    description="A small dynamically-typed Lisp-family scripting language",
    packages=find_packages(include=["yial", "yial.*"]),
    python_requires=">=3.11",
    install_requires=[],
    extras_require={
        "test": ["pytest>=7", "hypothesis>=6"],
    },
    entry_points={
        "console_scripts": ["yial=yial.repl:main"],
    },
    zip_safe=False,
)
