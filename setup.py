# setup.py
from setuptools import setup, find_packages

setup(
    name="rich_cards",
    version="0.1.0",
    description="Schema.org NewsArticle (JSON-LD) rich-card metadata for wiki pages",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "beautifulsoup4>=4.12",
        "click>=8.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": ["pytest>=7.4"],
    },
    entry_points={
        "console_scripts": ["rich-cards=rich_cards.cli:cli"],
    },
    python_requires=">=3.11",
)
