# setup.py
from setuptools import setup, find_packages

setup(
    name="condcollapse",
    version="0.1.0",
    description="Collapse redundant conditional clauses in test expectation files",
    package_dir={"": "src"},
    packages=find_packages(where="src"),      # automatically finds your modules
    install_requires=[
        "pandas>=2.3.0",
        "numpy",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "condcollapse=condcollapse.__main__:main",
        ],
    },
    python_requires=">=3.10",
    include_package_data=True,
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
