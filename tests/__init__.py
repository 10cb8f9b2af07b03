"""Test package for fifa_wage_model."""
