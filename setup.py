from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="unitgraph",
    version="0.1.0",
    author="unitgraph developers",
    description="Unit conversion by chaining runtime facts through a graph",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    package_data={
        '': ['facts/data/*.yaml', 'facts/data/*.parquet'],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
    install_requires=[
        "pandas>=1.3.0",
        "rapidfuzz>=2.0.0",
        "pyarrow>=10.0.0",
        "requests>=2.25.0",
        "pyyaml>=5.4",
    ],
    extras_require={
        "dev": ["pytest>=7.0.0"],
    },
)
