"""Workload helpers shared by the ravl commands and benchmarks."""
