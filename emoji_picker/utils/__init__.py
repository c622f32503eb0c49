# emoji_picker/utils/__init__.py
