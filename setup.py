# setup.py
from setuptools import setup, find_packages

setup(
    name="crawl_proxy",
    version="0.1.0",
    description="Proxy that lets clients such as Open WebUI talk to a crawl4ai server",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "aiohttp>=3.9",
        "pydantic>=2.0",
        "PyYAML>=6.0",
        "click>=8.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "crawl-proxy=crawl_proxy.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
