"""Operator authentication: session state machine, cookie encoding, login routes"""
