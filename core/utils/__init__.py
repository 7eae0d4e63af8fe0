"""Text scanning and number helpers"""
