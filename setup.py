from setuptools import setup

with open("README.md", "r") as fh:
    long_description = fh.read()


install_requires = ['numpy']

extras = {'test': ['pytest']}

setup(
    name="strideview",
    version="0.1.0",
    license="MIT",
    description="Zero-copy strided vector and matrix views over flat buffers",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=["strideview"],
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires='>=3.8',
    install_requires=install_requires,
    extras_require=extras,
)
