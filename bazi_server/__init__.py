# -*- coding: utf-8 -*-
"""
八字排盘与 AI 分析服务
"""
