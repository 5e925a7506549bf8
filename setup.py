#!/usr/bin/env python
# -*- coding: utf-8 -*-

from setuptools import setup, find_packages

readme = """Font language tools detect which written languages a font's
character coverage supports, scoring each known language by the fraction
of its required codepoints the font covers"""

setup(
    name="fontlangtools",
    version="0.1.0",
    description="Font language coverage tools",
    license="Apache",
    long_description=readme,
    python_requires=">=3.7",
    author="Noto Authors",
    author_email="noto-font@googlegroups.com",
    packages=find_packages(include=["fontlang", "fontlang.*"]),
    include_package_data=True,
    install_requires=[
        "fontTools",
        "PyYAML",
    ],
    extras_require={
        "test": ["pytest"],
    },
    package_data={"fontlang": ["data/*.yml"]},
    entry_points={
        "console_scripts": [
            "fontlang-detect = fontlang.detect_font_langs:main",
            "fontlang-compile = fontlang.generate_lang_table:main",
        ]
    },
)
