"""Diagnóstico - мастер квалификации лидов"""
