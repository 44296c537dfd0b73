"""Command line interface for rush-deploy"""
