"""텔레그램 봇"""
