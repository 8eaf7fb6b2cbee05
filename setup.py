from setuptools import setup

with open("README.md") as fh:
    long_description = fh.read()

setup(
    name="symxtal",
    version="0.3.1",
    author="symxtal developers",
    description="Exact crystallographic symmetry operations, Hall symbols and space-group tables.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=[
        "symxtal",
        "symxtal.database",
    ],
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    install_requires=[
        "numpy>=1.26",
        "pymatgen>=2024.3.1",
        "monty>=2024.2.26",
    ],
    extras_require={
        "test": ["wheel", "pytest", "coverage", "pytest-cov", "spglib>=2.5.0"],
    },
    python_requires=">=3.9",
    license="MIT",
)
