import os

from setuptools import find_packages, setup


# Read README for long description
def read_readme():
    readme_path = os.path.join(os.path.dirname(__file__), "README.md")
    if os.path.exists(readme_path):
        with open(readme_path, "r", encoding="utf-8") as f:
            return f.read()
    return "Multiple wave tracking and recognition from video foreground masks"


setup(
    name="wave-tracker",
    version="1.0.0",
    description="Track transient waves in video and recognize them from their motion dynamics",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    # Package configuration
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "numpy>=1.19",
        "opencv-python>=4.5",
        "pandas>=1.3",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    # Console scripts
    entry_points={
        "console_scripts": [
            "wave-tracker=wave_tracker.app.launcher:main",
        ],
    },
    # Metadata
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: Scientific/Engineering :: Image Recognition",
    ],
    python_requires=">=3.11",
    keywords="wave tracking, computer vision, background subtraction, opencv",
)
