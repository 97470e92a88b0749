HELP_TEXT = """\
tview shortcuts

Table
  h j k l / arrows   move left, down, up, right
  J K / PgDn PgUp    page down, page up
  g G                first row, last row
  0 $                first column, last column
  c                  collapse column (again to restore)
  e                  expand column (again to restore)
  i                  toggle row index
  y Y                copy cell, copy row
  s S                sort column ascending, descending
  v                  histogram of column
  Enter              show record
  Esc                close filtered view
  q / Ctrl+C         quit

Search and filter
  /                  search whole table
  \\                  search current column
  f                  filter rows by current column
  n N                next, previous result
  :                  command (row number, index, q)

Record / Histogram
  j k / PgDn PgUp    scroll
  h l                previous, next record
  y                  copy value
  Enter              filter by value (histogram)
  Esc                back to table

Press Esc or ? to close this help.
"""


class ShortcutHelpHandler:
    @staticmethod
    def get_text():
        return HELP_TEXT
