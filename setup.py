from setuptools import setup, find_packages

setup(
    name="titan-fs",
    version="1.0.0",
    description="Recursive filesystem operations for Titan automation tools",
    author="Ashwin Nair",
    packages=find_packages(include=["titan_fs", "titan_fs.*"]),
    python_requires=">=3.8",
    install_requires=[
        "PyYAML",
        "rich",
        "tqdm",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
