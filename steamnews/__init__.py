"""
Steam News Tide - Steam 新闻摄取与安全渲染
"""
