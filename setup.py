from setuptools import setup
setup(
    name="Goobjtools",
    version="0.1",
    packages=["goobj", "goobj.utils"],
    author="Dark Kirb",
    description="Tools for inspecting go object files",
    license="BSD-2clause",
    entry_points={
        "console_scripts": [
            "readgoobj = goobj.readgoobj:main"
        ]
    },
    install_requires=["PyYAML>=3.12", "aiofiles", "tqdm"],
    extras_require={
        "test": ["pytest"]
    }
)
