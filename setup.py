# setup.py
from setuptools import setup, find_packages

setup(
    name="prefnet",
    version="0.1.0",
    description="Binary CP-nets: dominance queries, example sampling and learning from optimal examples",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "numpy>=1.24",
        "pandas>=2.0",
        "networkx>=3.0",
        "rich>=13.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "prefnet=prefnet.cli:main",
        ],
    },
    python_requires=">=3.10",
    include_package_data=True,
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
