"""Apache-style access logging for WSGI applications. Compiles a
format like ``%h %l %u %t "%r" %>s %b`` once, then renders one line
per request from the captured response status and size.

"""

from setuptools import setup, find_packages


__version__ = '0.1.0dev'
__license__ = 'BSD'

desc = ('Apache-style access logging middleware for WSGI, with a'
        ' compiled format mini-language.')


setup(name='accesslog',
      version=__version__,
      description=desc,
      long_description=__doc__,
      packages=find_packages(),
      install_requires=['boltons>=20.0.0'],
      extras_require={'test': ['pytest']},
      python_requires='>=3.6',
      include_package_data=True,
      zip_safe=False,
      license=__license__,
      platforms='any',
      classifiers=[
          'Intended Audience :: Developers',
          'Topic :: System :: Logging',
          'Topic :: Internet :: WWW/HTTP :: WSGI :: Middleware',
          'Topic :: Utilities',
          'License :: OSI Approved :: BSD License',
          'Programming Language :: Python :: 3',
          'Programming Language :: Python :: Implementation :: CPython',
          'Programming Language :: Python :: Implementation :: PyPy',
      ]
)


"""
A brief checklist for release:

* tox
* git commit (if applicable)
* Bump setup.py version off of -dev
* git commit -a -m "bump version for x.y.z release"
* python -m build && twine upload dist/*
* git commit
* git tag -a x.y.z -m "brief summary"
* write CHANGELOG
* git commit
* bump setup.py version onto n+1 dev
* git commit
* git push

"""
