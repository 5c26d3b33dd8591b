"""Command line interface for promote-tool"""
