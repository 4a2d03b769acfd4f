"""In-process connection hub for broadcasts and a message router by type."""