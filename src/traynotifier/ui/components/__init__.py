"""Qt widgets"""
