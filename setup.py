# setup.py
from setuptools import setup, find_packages

setup(
    name="synquote",
    version="0.1.0",
    description="Hygienic syntax-quote macro expansion for a small Lisp",
    packages=find_packages(include=["synquote", "synquote.*"]),
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    zip_safe=False,
)
