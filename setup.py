# setup.py
from setuptools import setup, find_packages

setup(
    name="butler",
    version="0.1.0",
    description="Domain-restricted concurrent web crawler Butler",
    packages=find_packages(exclude=("tests", "tests.*")),  # автоматически найдёт папку butler
    package_data={"butler": ["templates/*.j2"]},
    install_requires=[
        "aiohttp>=3.9",
        "click>=8.1",
        "jinja2>=3.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": ["butler=butler.cli:cli"],
    },
    python_requires=">=3.11",
)
