"""Adaptadores de I/O: HTTP hacia el servidor de control y ficheros `--out`."""
