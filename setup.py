from setuptools import setup, find_packages

setup(
    name="deepl-translate-cli",
    version="1.2.0",
    packages=find_packages(exclude=["*.tests", "*.tests.*"]),
    entry_points={
        'console_scripts': [
            'deepl-translate-cli=deepl_cli.cli:main',
        ],
    },
    install_requires=[
        "requests",
        "colorama",
    ],
)
