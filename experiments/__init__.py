"""Experiment scripts for the TSP local search drivers."""
