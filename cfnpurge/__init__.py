"""
cfnpurge - Delete CloudFormation stacks whose ECR repositories still hold images.

CloudFormation's own DeleteStack fails on non-empty repositories. This package
empties every repository that belongs to a stack and only then deletes the stack.
"""

__version__ = "0.1.0"
__author__ = "cfnpurge contributors"
