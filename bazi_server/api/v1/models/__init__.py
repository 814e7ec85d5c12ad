# -*- coding: utf-8 -*-
"""API 请求/响应模型"""
