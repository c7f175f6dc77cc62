"""Key reference shown in the Help overlay."""

HELP_TEXT = """\
Navigation
  Up/Down        Move selection in the focused list
  PgUp/PgDn      Move selection by a page
  Home/End       First / last entry
  o              Toggle focus between configs and snapshots
  Tab/Shift-Tab  Next / previous config (also [ ] and Left/Right)

Snapshots
  r              Refresh configs and snapshots
  c              Create snapshot
  e              Edit description of the selected snapshot
  d              Delete selected snapshot (confirm)
  Enter          Status between previous and selected snapshot
  x              Diff between previous and selected snapshot
  m / U          Mount / unmount selected snapshot
  R              Rollback to selected snapshot (confirm)
  K              Cleanup with an algorithm (number, timeline, empty-pre-post)
  F or Ctrl-F    Filter snapshots

Configuration
  C              View config
  g              Edit config (form; Enter/e edits a field, s/y applies)
  Q              Setup quota
  Y              Sync selected snapshot to Limine

View
  f              Toggle fullscreen snapshot table
  u              Toggle userdata bar
  S              Toggle sudo mode
  ?              Help
  q              Quit

Details and Help
  Up/Down/PgUp/PgDn/Home/End  Scroll
  /              Search
  n / N          Next / previous match
  e              Edit config (Details only)
  Esc or q       Close

While loading
  Esc or q       Stop waiting (the command itself keeps running)
"""
