from setuptools import setup, find_packages

setup(
    name="reckon-lang",
    version="0.1.0",
    description="reckon — an arithmetic expression interpreter with let-bound variables",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    author="reckon Project",
    python_requires=">=3.9",
    packages=find_packages(),
    entry_points={
        "console_scripts": [
            "reckon=reckon.cli:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Interpreters",
    ],
)
