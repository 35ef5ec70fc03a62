# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="treesizer",
    version="0.1.0",
    description="Construye un árbol de directorios en memoria con tamaños acumulados y atributos de ocultación",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["treesizer", "treesizer.*"]),
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
