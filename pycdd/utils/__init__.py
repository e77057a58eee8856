"""
Utility submodule for pyCDD.

Modules
-------

- :mod:`parallel`:
  Defines :func:`~pycdd.utils.parallel.optimal_worker_count` and
  :func:`~pycdd.utils.parallel.split_into_batches`, used to spread events over
  worker processes.
"""
