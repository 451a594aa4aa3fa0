"""shacrypt.handlers -- raw crypt algorithm implementations"""
