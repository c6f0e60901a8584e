# Copyright 2025 Wahyu Ardiansyah
# Licensed under the Apache License, Version 2.0

from setuptools import find_packages, setup

setup(
    name="evalbridge",
    version="0.1.0",
    author="Wahyu Ardiansyah",
    description=(
        "Evaluate loaded computation graphs and exchange batches of "
        "variable-length sequences with dense tensor values"
    ),
    license="Apache-2.0",
    packages=find_packages(include=["evalbridge", "evalbridge.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.21.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "hypothesis>=6.0",
        ],
    },
    zip_safe=False,
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering :: Artificial Intelligence",
    ],
)
