from setuptools import setup, find_packages

setup(
    name="keyframesvg",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=[
        "lxml",
        "opencv-python",
        "numpy",
        "svgwrite",
        "PyYAML"
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "keyframesvg=keyframesvg.cli:main",
        ],
    },
    python_requires=">=3.7",
    description="Convert frame sequences to and from keyframe animated SVG files",
    author="",
    author_email="",
    url="",
)
