"""Конфигурация приложения"""
