"""Multi-file comparison pipeline.

extract -> series -> {summary, overlay} -> charts; pipeline.compare_files drives
one run over a batch of decoded files.
"""
