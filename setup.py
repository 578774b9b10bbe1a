from setuptools import setup, find_packages

setup(
    name='luapack',
    version='0.1.0',
    py_modules=['luapack', 'packer'],
    packages=find_packages(exclude=['tests', 'tests.*']),
    package_data={
        'luabundle.runtime': ['*.lua'],
    },
    python_requires='>=3.8',
    install_requires=[
        'lark',
        'pydantic>=2.0',
    ],
    extras_require={
        'test': [
            'pytest',
            'lupa',
        ],
    },
    entry_points={
        'console_scripts': [
            'luapack = luapack:main',
        ],
    },
)
