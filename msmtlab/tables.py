# -*- mode: python; coding: utf-8 -*-
# Copyright 2026 the msmtlab developers.
# Licensed under the MIT license.

"""Tables of Measures as LaTeX or Typst source.

Both functions take *columns*, a sequence of sequences of
:class:`~msmtlab.msmt.Measure` objects -- typically one sequence per
measured quantity -- and an optional *header* with one label per column.
Each Measure is rounded and printed in the style matching the output
format. Short columns are padded with empty cells. If *transpose* is false,
each quantity runs along a row instead of down a column.

"""

__all__ = '''
latex
typst
'''.split ()

from .msmt import Style


def _cells (columns, header, transpose, style):
    cols = [[m.format (style) for m in col] for col in columns]
    if not cols:
        raise ValueError ('a table needs at least one column')

    header = list (header)
    if len (header) > len (cols):
        raise ValueError ('got %d header labels for %d columns' % (len (header), len (cols)))

    nrows = max (len (c) for c in cols)
    for c in cols:
        c.extend ([''] * (nrows - len (c)))

    if header:
        header.extend ([''] * (len (cols) - len (header)))
        cols = [[h] + c for h, c in zip (header, cols)]

    if transpose:
        return [list (row) for row in zip (*cols)]
    return cols


def latex (columns, header=(), caption='caption', label='label', transpose=True):
    """Return the source of a LaTeX ``table`` environment."""
    rows = _cells (columns, header, transpose, Style.latex)
    width = max (len (r) for r in rows)

    lines = [
        '\\begin{table}[ht]',
        '    \\centering',
        '    \\caption{%s}' % caption,
        '    \\label{%s}' % label,
        '    \\begin{tabular}{%s|}' % ('|c' * width),
    ]
    lines += ['        %s \\\\' % ' & '.join (r) for r in rows]
    lines += [
        '    \\end{tabular}',
        '\\end{table}',
    ]
    return '\n'.join (lines)


def typst (columns, header=(), transpose=True):
    """Return the source of a Typst ``table`` call."""
    rows = _cells (columns, header, transpose, Style.typst)
    width = max (len (r) for r in rows)

    lines = [
        'table(',
        '    columns: %d,' % width,
        '    align: center,',
    ]
    lines += ['    %s,' % ', '.join ('[%s]' % c for c in r) for r in rows]
    lines.append (')')
    return '\n'.join (lines)
