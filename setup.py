# setup.py
from setuptools import setup, find_packages

setup(
    name="lakernel",
    version="1.0.0",
    description="Compact float32 linear-algebra kernel for 3D engines",
    packages=find_packages(include=["lakernel", "lakernel.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=2.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
)
