# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="mal",
    version="0.1.0",
    description="A small s-expression interpreter: reader, value model and evaluator",
    python_requires=">=3.10",
    packages=find_namespace_packages(include=["mal", "mal.*"]),
    install_requires=[],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["mal = mal.repl:main"],
    },
    zip_safe=False,
)
