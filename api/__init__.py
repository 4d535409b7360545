"""HTTP surface over the chesscore engine."""
