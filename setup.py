# setup.py
from setuptools import setup, find_packages

setup(
    name="creepy",
    version="0.1.0",
    description="Creepy crawly web crawler: hit/miss classification over allow/deny rules",
    packages=find_packages(exclude=("tests", "tests.*")),
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "soupsieve>=2.5",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "click>=8.2",
        "Jinja2>=3.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "creepy=creepy.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
