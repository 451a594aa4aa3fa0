"""shacrypt tests"""
