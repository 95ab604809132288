from setuptools import find_packages, setup

setup(
    name="simpleprogress",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    entry_points={
        "console_scripts": [
            "simpleprogress-demo=simpleprogress.demo:main",
        ],
    },
    python_requires=">=3.10",
    install_requires=[
        "rich",
        "structlog",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
