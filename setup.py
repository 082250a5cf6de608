# setup.py
from setuptools import setup, find_packages

setup(
    name="kappa",
    version="0.1.0",
    description="A small Clojure-flavoured Lisp interpreter with closures, Vars and macros",
    packages=find_packages(include=["kappa", "kappa.*"]),
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    zip_safe=False,
)
