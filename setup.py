from setuptools import setup, find_packages
import os

# Import version from OnlyConfig/__init__.py
import re
with open(os.path.join('OnlyConfig', '__init__.py'), 'r') as f:
    version = re.search(r"__version__\s*=\s*'(.*)'", f.read()).group(1)

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="OnlyConfig",
    version=version,
    author="OnlyConfig Contributors",
    description="A runtime configuration store with schema validation, deep merging and change subscriptions",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(include=["OnlyConfig", "OnlyConfig.*"]),
    python_requires=">=3.8",
    install_requires=[
        "pydantic>=2.0",
        "PyYAML>=5.4",
        "click>=8.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "onlyconfig=OnlyConfig.__main__:main",
        ],
    },
)
