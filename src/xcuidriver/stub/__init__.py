"""Stub WebDriverAgent module for xcuidriver.

A software stand-in for the device-resident agent. Provides an HTTP
server that answers the endpoints the driver proxies to, with canned
screen geometry and a log of received commands.
"""
