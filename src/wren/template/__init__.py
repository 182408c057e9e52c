"""URI templates: lexer, operator table, expansion and extraction engines.

A template string is tokenized once into an immutable node sequence;
``Template.expand`` and ``Template.match`` walk that sequence.
"""
