from setuptools import setup, find_packages

setup(
    name="wdsession",
    version="1.0.0",
    packages=find_packages(include=["wdsession", "wdsession.*"]),
    install_requires=[
        "rich",
        "httpx>=0.25.2",
        "dataclasses-json>=0.6.0",
        "python-dotenv>=1.0.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio",
        ],
    },
    entry_points={
        "console_scripts": [
            "wdsession-cli=wdsession.cli:main",
        ],
    },
    python_requires=">=3.9",
    description="WebDriver session lifecycle and capability negotiation",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
