# nineblock/core/__init__.py
