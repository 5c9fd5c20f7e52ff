from setuptools import setup, find_packages

setup(
    name="geophoto",
    version="0.1.0",
    description="GPS position and GPS time extraction from photo EXIF data",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "Pillow>=9.0",
        "piexif>=1.1",
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.8",
)
