from setuptools import setup, find_packages

setup(
    name='strictool',
    version='0.1.0',
    license="Apache 2.0",
    description="Typed Python functions as strict-schema tools for LLM tool calling",
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    entry_points={
        'console_scripts': [
            'strictool-schema=strictool.command.strictool_schema:run',
        ],
    },
    install_requires=[
        "pydantic>=2.5",
        "pydantic-core>=2.14",
        "PyYAML>=6.0",
        "click>=8.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
    ],
    python_requires='>=3.11',
)
