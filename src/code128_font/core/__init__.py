"""Code 128 encoding core: symbol table, code set selection, checksum."""
