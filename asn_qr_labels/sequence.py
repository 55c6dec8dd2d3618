"""
Label identifier sequencing.
"""

# local repo modules
import asn_qr_labels as aql
import asn_qr_labels.config


GridSpec = aql.config.GridSpec


#============================================
def format_identifier(prefix: str, number: int, zeros: int) -> str:
	"""
	Format a label identifier.

	Args:
		prefix: Identifier prefix.
		number: Label number.
		zeros: Zero-padding width, 0 for none.

	Returns:
		Prefix followed by the padded number. A number wider than the
		padding is kept in full.
	"""
	return f"{prefix}{number:0{zeros}d}" if zeros > 0 else f"{prefix}{number}"


#============================================
def identifier_at(start: int, row: int, col: int, across: int, prefix: str, zeros: int) -> str:
	"""
	Compute the identifier for a grid cell.

	Args:
		start: Number of the first label on the page.
		row: Row index.
		col: Column index.
		across: Labels per row.
		prefix: Identifier prefix.
		zeros: Zero-padding width.

	Returns:
		Identifier string.
	"""
	return format_identifier(prefix, start + row * across + col, zeros)


#============================================
def page_identifiers(start: int, grid: GridSpec, prefix: str, zeros: int) -> list[str]:
	"""
	List a page's identifiers in reading order.
	"""
	return [
		identifier_at(start, row, col, grid.labels_across, prefix, zeros)
		for row in range(grid.labels_down)
		for col in range(grid.labels_across)
	]
