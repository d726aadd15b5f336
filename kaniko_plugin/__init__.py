"""
Script: kaniko_plugin package
What: Pre-flight helpers for the kaniko build and push pipeline step.
Doing: Writes registry credentials, resolves repository addresses, and hands a build request to the kaniko executor.
Why: Keeps registry auth and naming rules in one tested place instead of inside the container entrypoint.
Goal: Give the executor exactly the credentials and image names it expects.
"""

__version__ = "1.0.0"
