"""Logging and performance helpers"""
