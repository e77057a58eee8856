"""
Bundled data for pyCDD.

- :mod:`pycdd.data.defaults`: TOPAS parameter presets for the clustered DNA damage scorer,
  resolved through :mod:`pycdd.io.data_registry`.
"""
