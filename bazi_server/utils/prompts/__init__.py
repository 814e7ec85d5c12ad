# -*- coding: utf-8 -*-
"""LLM prompt 构建"""
