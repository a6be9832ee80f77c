"""Utility helpers shared by the core, API and CLI layers"""
