# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="objsnoop",
    version="0.1.0",
    description="Read-only property and collection inspector for object graphs",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["objsnoop*"]),
    python_requires=">=3.9",
    install_requires=[
        "requests",  # Carga de documentos remotos (DocumentStore.from_url)
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'objsnoop=objsnoop.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
