"""
Setup script for the star rating view widget library
"""
from setuptools import setup

setup(
    name='star-rating-view',
    version='1.0.0',
    description='Star rating display widget for PySide6 with fractional star fill',
    python_requires='>=3.9',
    packages=[
        'star_rating_view',
        'star_rating_view.ui',
    ],
    install_requires=[
        'PySide6>=6.4',
        'numpy',
        'python-dotenv',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'gui_scripts': [
            'star-rating = star_rating_view.app:main',
        ],
    },
)
