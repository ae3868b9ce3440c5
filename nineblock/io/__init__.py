# nineblock/io/__init__.py
