"""Prep Kitchen: back-of-house item reconciliation and prep list service."""
