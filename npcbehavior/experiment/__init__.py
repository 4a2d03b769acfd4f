"""Scenarios, metrics and scale-configuration generation for architecture comparisons."""