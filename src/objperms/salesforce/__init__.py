"""Salesforce API boundary: SOQL building, cached client, bulk jobs and metadata."""
