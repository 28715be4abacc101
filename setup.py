from setuptools import setup, find_packages

setup(
    name="commandment",
    version="0.1.0",
    description="Typed, validated command-line parsing with sync and cancellable async actions.",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    author="The Commandment Authors",
    packages=find_packages(include=["commandment", "commandment.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.0",
        "python-dateutil>=2.8",
        "python-json-logger>=3.1",
        "pyyaml>=6.0",
        "rich>=13.0",
        "toml>=0.10",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
        ],
    },
    entry_points={
        "console_scripts": [
            "commandment=commandment.__main__:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Development Status :: 3 - Alpha",
    ],
)
