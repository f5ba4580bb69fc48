"""
Movie recommendation service.

Serves filtered, paginated movie picks from a bundled IMDB dataset and keeps
a local favorites list mirrored to Google Sheets when configured.
"""
